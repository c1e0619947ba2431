# ==============================================
# ENCODING
# ==============================================
#
# Compact code -> label mappings stored as a single
# opaque string value in the normal form.
#
# Modules:
# --------
# - codec.py  → encode / is_encoded / codes / decodes
#
# ==============================================

from .codec import encode, is_encoded, codes, decodes

__all__ = ["encode", "is_encoded", "codes", "decodes"]
