"""Transactions domain - Income and payout ledger"""
