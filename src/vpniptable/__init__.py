"""
vpniptable - VPN route table maintenance

Keeps a minimal set of IPv4 CIDR ranges for split-tunnel VPN routing,
persists it as YAML and renders it as CSV or Windows route commands.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
