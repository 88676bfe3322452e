"""Side-effect services"""
