"""Clients domain - people receiving care"""
