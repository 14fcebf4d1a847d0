"""
Transport Constants

Event names understood by the orchestration server.
"""

TOPIC_STATUS_UPDATE = "probe:status:update"
TOPIC_IPV4_SUPPORTED_UPDATE = "probe:isIPv4Supported:update"
TOPIC_IPV6_SUPPORTED_UPDATE = "probe:isIPv6Supported:update"

# Seconds to wait for the initial connection before giving up
CONNECT_TIMEOUT = 10
