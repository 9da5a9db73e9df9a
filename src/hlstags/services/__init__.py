"""Service layer — settings-bound codec facade returning CodecResult.

Services may import from domain and config layers.
"""
