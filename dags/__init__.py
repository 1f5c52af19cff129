"""Airflow DAGs for ABOR / IBOR position reconciliation."""
