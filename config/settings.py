import os


class Settings:
    """Configuration settings for the position reconciliation process."""

    # Materiality threshold as a fraction of AUM (0.01 = 1%)
    RECON_THRESHOLD = float(os.getenv("RECON_THRESHOLD", "0.01"))

    # Position File Paths
    DOWNLOAD_DIR = os.getenv("DOWNLOAD_DIR", "/opt/airflow/sftp_data/downloads")
    ABOR_PATH = os.getenv("ABOR_PATH", f"{DOWNLOAD_DIR}/abor.csv")
    IBOR_PATH = os.getenv("IBOR_PATH", f"{DOWNLOAD_DIR}/ibor.csv")

    # MongoDB Configuration
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://host.docker.internal:27017")
    DB_NAME = os.getenv("MONGO_DB_NAME", "position_recon")
    RECONCILIATION_COLLECTION = os.getenv("RECONCILIATION_COLLECTION", "reconciliation_rows")
    RECONCILIATION_RUNS_COLLECTION = os.getenv("RECONCILIATION_RUNS_COLLECTION", "reconciliation_runs")

    # SFTP Configuration
    SFTP_HOST = os.getenv("SFTP_HOST", "sftp-server")
    SFTP_PORT = int(os.getenv("SFTP_PORT", "22"))
    SFTP_USERNAME = os.getenv("SFTP_USERNAME", "testuser")
    SFTP_PASSWORD = os.getenv("SFTP_PASSWORD", "testpass")
    SFTP_REMOTE_DIR = os.getenv("SFTP_REMOTE_DIR", "/uploads")


# Create a singleton instance
settings = Settings()
