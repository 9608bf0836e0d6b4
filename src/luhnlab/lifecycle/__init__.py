"""
Lifecycle operations on identifiers supplied by callers.

Currently: deterministic masking (pseudonymization) of personnummer.
"""

from luhnlab.lifecycle.anonymize import MaskResult, PersonnummerMasker, mask_personnummer

__all__ = [
    "MaskResult",
    "PersonnummerMasker",
    "mask_personnummer",
]
