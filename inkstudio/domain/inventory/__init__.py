"""Inventory domain - stock items and the movement ledger"""
