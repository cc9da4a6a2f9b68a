"""Upload negotiation: config resolution, classification and extraction."""

from .classifier import UploadClassifier, classify_upload
from .config_resolver import UploadConfigResolver
from .encoding import decode_data_url, encode_payload
from .extractor import AttachmentExtractor

__all__ = [
    "AttachmentExtractor",
    "UploadClassifier",
    "UploadConfigResolver",
    "classify_upload",
    "decode_data_url",
    "encode_payload",
]
