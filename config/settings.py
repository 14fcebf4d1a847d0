"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Deployment-specific values (server URL, packet count) come from .env
- Import these settings in modules: from config.settings import PING_TARGETS
- Probe targets are fixed, they are NOT configurable per call
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# PING TEST CONFIGURATION
# =============================================================================

# Number of ICMP echo requests sent to each target per probe
STATUS_NUMBER_OF_PACKETS = int(os.getenv("STATUS_NUMBER_OF_PACKETS", "6"))

# Delay between two testing rounds (seconds)
STATUS_CHECK_INTERVAL = 10 * 60  # 10 minutes

# DNS infrastructure hosts, reachable over both IPv4 and IPv6
PING_TARGETS = ("ns1.registry.in", "k.root-servers.net", "ns1.dns.nl")

# Minimum number of targets that must answer cleanly for a family to pass
PING_QUORUM = 2

# IP families probed on every round
IP_VERSIONS = (4, 6)

# ping(8) flags
PING_PACKET_INTERVAL = 0.2  # seconds between packets (-i)
PING_DEADLINE = int(os.getenv("PING_DEADLINE", "15"))  # hard stop (-w)

# =============================================================================
# SYSTEM DEPENDENCIES
# =============================================================================

# Binaries that must be on PATH before any round is run
REQUIRED_DEPENDENCIES = ("unbuffer",)

# =============================================================================
# TRANSPORT CONFIGURATION
# =============================================================================

SOCKET_SERVER_URL = os.getenv("SOCKET_SERVER_URL", "http://localhost:3000")
SOCKET_NAMESPACE = os.getenv("SOCKET_NAMESPACE", "/probes")
SOCKET_RECONNECT = os.getenv("SOCKET_RECONNECT", "1") == "1"

# "auto", "real" or "mock"
PING_RUNNER_MODE = os.getenv("PING_RUNNER_MODE", "auto")
EMITTER_MODE = os.getenv("EMITTER_MODE", "auto")

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("LOG_DIR", "/var/log/probe")
LOG_SERVICE_FILE = "service.log"
LOG_BACKUP_COUNT = 7  # days
