"""Payments domain - Two-stage (signal/final) client payments"""
