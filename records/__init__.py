"""Clinic records application.

Models, services and API views for clients, pets and their medical
records, appointments and reminders.
"""
