"""Reporting module exports"""
from .tables import fetch_table, fetch_sales_detail, collect_report, render_report

__all__ = ['fetch_table', 'fetch_sales_detail', 'collect_report', 'render_report']
