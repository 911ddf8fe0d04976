"""Data Quality configuration"""
import os

# Star schema gate
DQ_MIN_FACT_ROWS = int(os.getenv("DQ_MIN_FACT_ROWS", "0"))
