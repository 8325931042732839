# Debounce
DEBOUNCE_SECONDS = 1.0  # Default quiet period before a value settles
MAX_DEBOUNCE_SECONDS = 60.0  # Upper bound accepted from API clients

# Search sessions
MAX_SESSIONS = 1000  # Concurrent live-search sessions per process
MAX_TEXT_LENGTH = 1024  # Longest search text accepted per update

# Event log
EVENT_LOG_MAXLEN = 500  # Settled events kept in the ring buffer
