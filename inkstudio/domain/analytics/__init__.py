"""Analytics domain - dashboards, reports and CSV exports"""
