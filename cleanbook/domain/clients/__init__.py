"""Clients domain - Client profile management"""
