"""
Version constants for the snapshot decoder service.
"""

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
DECODER_VERSION = "mhtml-decoder-1.0.0"
