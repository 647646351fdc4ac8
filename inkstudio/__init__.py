"""Ink Studio - appointments, clients, masters, inventory and reporting API"""
