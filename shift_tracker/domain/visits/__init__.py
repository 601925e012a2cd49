"""Visits domain - check-in/check-out lifecycle for scheduled visits"""
