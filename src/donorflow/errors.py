"""
Donorflow error taxonomy.

Every failure aborts the whole run.  The CLI maps each class to a
process exit code through its ``exit_code`` attribute.
"""

from __future__ import annotations


class DonorflowError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(DonorflowError):
    exit_code = 2


class AddressParseError(ConfigurationError):
    pass


class CampaignParamsError(ConfigurationError):
    pass


class SigningError(DonorflowError):
    exit_code = 3


class NetworkError(DonorflowError):
    exit_code = 4


class MetadataError(DonorflowError, ValueError):
    exit_code = 5


class DecodeError(MetadataError):
    """Input is not valid hexadecimal."""


class EncodingError(MetadataError):
    """Decoded bytes are not valid UTF-8."""


class FormatError(MetadataError):
    """Text is not a JSON object with a string ``title``."""


__all__ = [
    "AddressParseError",
    "CampaignParamsError",
    "ConfigurationError",
    "DecodeError",
    "DonorflowError",
    "EncodingError",
    "FormatError",
    "MetadataError",
    "NetworkError",
    "SigningError",
]
