# Session state = everything one conversation owns while it is active.

# One MemoryManager per session id, created when the session starts and
# dropped when it ends. Nothing is persisted and nothing is shared between
# sessions.
