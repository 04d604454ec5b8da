import os


class Settings:
    """Application settings with environment variable overrides."""

    APP_NAME: str = "locsheet"
    APP_VERSION: str = "1.0.0"

    # Culture of the source text. Layout B has no header for it, so the
    # importer assumes this one.
    NATIVE_CULTURE: str = os.getenv("LOCSHEET_NATIVE_CULTURE", "en")

    # Culture sheet that gets the red/green "Done" highlighting in Layout B
    REVIEW_CULTURE: str = os.getenv("LOCSHEET_REVIEW_CULTURE", "de")

    # Backups of overwritten workbooks go to <file dir>/<BACKUP_DIR_NAME>/
    BACKUP_DIR_NAME: str = os.getenv("LOCSHEET_BACKUP_DIR", "backups")

    # Upper bound for auto-sized column widths (characters)
    MAX_COLUMN_WIDTH: int = int(os.getenv("LOCSHEET_MAX_COLUMN_WIDTH", "100"))


settings = Settings()
