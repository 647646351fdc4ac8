"""Service catalog domain"""
