import os

import firebase_admin
from dotenv import load_dotenv
from firebase_admin import credentials, firestore
from google.cloud.firestore import Client

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    FIREBASE_PROJECT_ID: str | None = os.getenv("FIREBASE_PROJECT_ID")
    FIREBASE_CREDENTIALS: str | None = os.getenv("FIREBASE_CREDENTIALS")
    FIRESTORE_DATABASE: str | None = os.getenv("FIRESTORE_DATABASE")

    SUBJECTS_COLLECTION: str = os.getenv("SUBJECTS_COLLECTION", "subjects")
    THEMES_COLLECTION: str = os.getenv("THEMES_COLLECTION", "themes")

    THEMES_FILE: str = os.getenv("THEMES_FILE", "data/themes.json")

    BATCH_SIZE: int = int(os.getenv("FIRESTORE_BATCH_SIZE", "500"))


def get_firestore_client(config: Config | None = None) -> Client:
    """
    Initialize the Firebase app (once per process) and return a Firestore client.

    Uses the service account file from FIREBASE_CREDENTIALS when set, otherwise
    Application Default Credentials.

    Returns:
        Client: Firestore client bound to the configured project and database
    """
    config = config or Config()

    try:
        app = firebase_admin.get_app()
    except ValueError:
        if config.FIREBASE_CREDENTIALS:
            cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
        else:
            cred = credentials.ApplicationDefault()

        options = None
        if config.FIREBASE_PROJECT_ID:
            options = {"projectId": config.FIREBASE_PROJECT_ID}
        app = firebase_admin.initialize_app(cred, options)

    return firestore.client(app, database_id=config.FIRESTORE_DATABASE)
