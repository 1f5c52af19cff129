from datetime import datetime
from pymongo import MongoClient
from typing import Dict
from contextlib import contextmanager
import uuid
import logging

logger = logging.getLogger(__name__)


@contextmanager
def get_mongo_connection(mongo_uri: str):
    client = None
    try:
        client = MongoClient(mongo_uri)
        yield client
    finally:
        if client:
            client.close()


def store_reconciliation_results(
    mongo_uri: str,
    db_name: str,
    rows_collection: str,
    runs_collection: str,
    result: Dict,
    threshold: float
) -> Dict:
    """
        Store one document per reconciliation row plus a run summary.

        ``result`` is the dict form of a ``ReconciliationResult``.
    """
    with get_mongo_connection(mongo_uri) as client:
        db = client[db_name]

        run_id = str(uuid.uuid4())
        now = datetime.now()
        metadata = {
            "reconciliation_run_id": run_id,
            "reconciliation_date": now,
            "created_at": now,
        }

        records = [dict(row, **metadata) for row in result["rows"]]
        if records:
            db[rows_collection].insert_many(records)

        db[runs_collection].insert_one(dict(
            metadata,
            aum=result["aum"],
            total_diff=result["total_diff"],
            exception_count=result["exception_count"],
            parse_flags=result["parse_flags"],
            threshold=threshold,
            row_count=len(records),
        ))

        _log_summary(run_id, result, len(records), db_name, rows_collection)

        return {
            "run_id": run_id,
            "total_records": len(records),
            "exception_count": result["exception_count"],
        }


def _log_summary(
    run_id: str,
    result: Dict,
    total_records: int,
    db_name: str,
    collection_name: str
) -> None:
    logger.info("=" * 70)
    logger.info("RECONCILIATION SUMMARY")
    logger.info("=" * 70)
    logger.info(f"Run ID:                      {run_id}")
    logger.info(f"Total Records Inserted:      {total_records}")
    logger.info(f"  - ABOR AUM:                {result['aum']:,.2f}")
    logger.info(f"  - Total Diff Notional:     {result['total_diff']:,.2f}")
    logger.info(f"  - Exceptions:              {result['exception_count']}")
    if result["parse_flags"]:
        logger.info(f"  - Parse Flags:             {'; '.join(result['parse_flags'])}")
    logger.info(f"Collection:                  {db_name}.{collection_name}")
    logger.info("=" * 70)
