"""Salon customer records: contact details, style preferences and visit history."""
