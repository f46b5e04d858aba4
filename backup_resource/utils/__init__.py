"""
Backup Resource Utilities

Helpers shared by the verbs: time zone normalization, record persistence
and the optional credential file side channel.
"""

from .timezone import get_reporting_zone, to_zone, format_rfc3339, format_in_zone
from .output import write_record
from .credentials import write_credential_file, CREDENTIALS_ENV

__all__ = [
    'get_reporting_zone',
    'to_zone',
    'format_rfc3339',
    'format_in_zone',
    'write_record',
    'write_credential_file',
    'CREDENTIALS_ENV'
]
