"""Collaborators domain - Collaborator profile and credentials"""
