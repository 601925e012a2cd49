"""Schedules domain - scheduling, dashboard queries and statistics"""
