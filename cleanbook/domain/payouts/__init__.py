"""Payouts domain - Collaborator rate table and payout calculation"""
