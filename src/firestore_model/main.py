from __future__ import annotations

from firestore_model.settings import load_settings


def main() -> int:
    settings = load_settings()
    print("firestore_model started")
    print(
        "config: "
        f"app_env={settings.app_env}, "
        f"firestore_project_id={settings.firestore_project_id or '(unset)'}, "
        f"firestore_database={settings.firestore_database}, "
        f"info_collection={settings.info_collection}, "
        f"log_level={settings.log_level}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
