"""ABOR vs IBOR position reconciliation DAG."""

from airflow import DAG
from airflow.sdk.definitions.decorators import task
from datetime import datetime, timedelta

from config.settings import settings
from core import reconcile
from integrations import mongo_handler
from integrations.sftp_client import SFTPClient
from processors.position_loader import PositionLoader, require_inputs


@task
def download_position_files():
    """Download the latest ABOR and IBOR files from the SFTP server."""
    client = SFTPClient(
        host=settings.SFTP_HOST,
        port=settings.SFTP_PORT,
        username=settings.SFTP_USERNAME,
        password=settings.SFTP_PASSWORD,
    )

    downloaded = {}
    if client.connect():
        downloaded = client.download_position_files(
            remote_dir=settings.SFTP_REMOTE_DIR,
            local_dir=settings.DOWNLOAD_DIR,
        )
        client.disconnect()
    return downloaded


@task
def load_positions(paths):
    """Read both books, falling back to the configured paths."""
    loader = PositionLoader(
        abor_path=paths.get("abor", settings.ABOR_PATH),
        ibor_path=paths.get("ibor", settings.IBOR_PATH),
    )
    abor, ibor = require_inputs(loader.read_abor(), loader.read_ibor())
    return {"abor": abor, "ibor": ibor}


@task
def reconcile_positions(raw):
    """Reconcile ABOR against IBOR at the configured threshold."""
    result = reconcile(raw["abor"], raw["ibor"], settings.RECON_THRESHOLD)
    return result.to_dict()


@task
def store_reconciliation_results(result):
    """Store reconciliation rows and the run summary to MongoDB."""
    return mongo_handler.store_reconciliation_results(
        settings.MONGO_URI,
        settings.DB_NAME,
        settings.RECONCILIATION_COLLECTION,
        settings.RECONCILIATION_RUNS_COLLECTION,
        result,
        settings.RECON_THRESHOLD,
    )


with DAG(
    dag_id="position_recon",
    start_date=datetime(2024, 1, 1),
    schedule=None,
    catchup=False,
    default_args={
        "owner": "batch_processing",
        "retries": 3,
        "retry_delay": timedelta(seconds=10),
    },
    tags=["abor", "ibor", "recon"],
) as dag:

    paths = download_position_files()
    raw_positions = load_positions(paths)
    result = reconcile_positions(raw_positions)
    stored = store_reconciliation_results(result)

    paths >> raw_positions >> result >> stored
