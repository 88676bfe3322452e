"""Lifecycle domain - Service status state machine"""
