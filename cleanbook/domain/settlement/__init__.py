"""Settlement domain - Read-time views over payments and payouts"""
