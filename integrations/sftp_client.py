import paramiko
import logging
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

POSITION_FILE_EXTENSIONS = (".csv", ".txt", ".dbf")
BOOKS = ("abor", "ibor")


class SFTPClient:
    def __init__(self, host, port, username, password):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.ssh_client = None
        self.sftp_client = None

    def connect(self):
        try:
            self.ssh_client = paramiko.SSHClient()
            # Security: Only accept known hosts (not AutoAddPolicy which accepts any host)
            self.ssh_client.set_missing_host_key_policy(paramiko.WarningPolicy())

            self.ssh_client.connect(
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                timeout=10
            )
            self.sftp_client = self.ssh_client.open_sftp()

            logger.info(f"Connected to SFTP server {self.host}:{self.port}")
            return True

        except Exception as e:
            logger.error(f"SFTP connection failed: {e}")
            return False

    def disconnect(self):
        if self.sftp_client:
            self.sftp_client.close()

        if self.ssh_client:
            self.ssh_client.close()

    def list_position_files(self, remote_dir="/uploads") -> List[paramiko.SFTPAttributes]:
        try:
            entries = self.sftp_client.listdir_attr(remote_dir)
        except Exception as e:
            logger.error(f"Failed to list {remote_dir}: {e}")
            return []

        files = [
            entry for entry in entries
            if entry.filename.lower().endswith(POSITION_FILE_EXTENSIONS)
        ]
        logger.info(f"Found {len(files)} position files in {remote_dir}")
        return files

    @staticmethod
    def latest_for_book(files, book: str) -> Optional[str]:
        """Name of the most recently modified file whose name starts with ``book``."""
        candidates = [f for f in files if f.filename.lower().startswith(book)]
        if not candidates:
            return None
        return max(candidates, key=lambda f: f.st_mtime or 0).filename

    def download_position_files(
        self,
        remote_dir="/uploads",
        local_dir="/opt/airflow/sftp_data/downloads"
    ) -> Dict[str, str]:
        files = self.list_position_files(remote_dir)

        downloaded = {}
        for book in BOOKS:
            filename = self.latest_for_book(files, book)
            if filename is None:
                logger.warning(f"No {book.upper()} position file in {remote_dir}")
                continue

            remote_path = f"{remote_dir}/{filename}"
            local_path = f"{local_dir}/{filename}"
            try:
                Path(local_path).parent.mkdir(parents=True, exist_ok=True)
                self.sftp_client.get(remote_path, local_path)
                file_size = Path(local_path).stat().st_size
                logger.info(f"Downloaded {book.upper()} file {filename} ({file_size} bytes)")
                downloaded[book] = local_path

            except Exception as e:
                logger.error(f"Failed to download {filename}: {e}")

        logger.info(f"Downloaded {len(downloaded)}/{len(BOOKS)} position files")
        return downloaded
