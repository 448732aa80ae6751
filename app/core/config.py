from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env wird automatisch gelesen
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "GrammarAPI"
    environment: str = "dev"
    log_level: str = "INFO"

    # Satzgrenzen für Tonalität und Passiv-Erkennung
    # "spacy": blank-Pipeline + sentencizer (kein Modell-Download nötig)
    # "regex": einfache Interpunktions-Trennung
    sentence_splitter: Literal["spacy", "regex"] = "spacy"
    spacy_language: str = "en"

    # Session-Speicher für verworfene Muster (älteste fliegen zuerst raus)
    max_dismissed_patterns: int = 1000
    # Undo-Stack pro CorrectionHandler
    correction_history_size: int = 50

    # Lesezeit-Schätzung (Wörter pro Minute)
    reading_speed_wpm: int = 200


settings = Settings()
