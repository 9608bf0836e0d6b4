"""
Luhnlab - Swedish test data with valid checksums.

Seedable generation of personnummer, organisationsnummer, card numbers,
IMEI, IBAN and giro numbers, plus masking and validation.
"""

__version__ = "0.1.0"
