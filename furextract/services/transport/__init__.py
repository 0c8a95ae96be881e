from .client import FurAffinityClient
from .http import HttpTransport, Transport

__all__ = ['FurAffinityClient', 'HttpTransport', 'Transport']
