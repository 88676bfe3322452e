"""CleanBook - Cleaning service settlement backend"""
