__all__ = [
    # Errors
    "DonorflowError",
    "ConfigurationError",
    "AddressParseError",
    "CampaignParamsError",
    "SigningError",
    "NetworkError",
    "MetadataError",
    "DecodeError",
    "EncodingError",
    "FormatError",
    # Configuration
    "Settings",
    "load_settings",
    # Metadata codec
    "Metadata",
    "decode_metadata",
    # Campaign parameters
    "CampaignParams",
    "Segment",
    "build_campaign_params",
    # Chain
    "ChainClient",
    "ContractInteraction",
    "CampaignCreation",
]

from .errors import (
    AddressParseError,
    CampaignParamsError,
    ConfigurationError,
    DecodeError,
    DonorflowError,
    EncodingError,
    FormatError,
    MetadataError,
    NetworkError,
    SigningError,
)
from .config import Settings, load_settings
from .metadata import Metadata, decode as decode_metadata
from .campaign import CampaignParams, Segment, build_campaign_params
from .pneuma.client import ChainClient
from .interaction import CampaignCreation, ContractInteraction
