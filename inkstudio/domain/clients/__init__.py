"""Client domain - client records and problem-client lookups"""
