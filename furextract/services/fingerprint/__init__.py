from .hasher import compute_fingerprint, fingerprint_submission, perceptual_hash

__all__ = ['compute_fingerprint', 'fingerprint_submission', 'perceptual_hash']
