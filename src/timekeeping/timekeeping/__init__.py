"""NexusHR timekeeping package.

Organized by feature modules (attendance, roster, leave, sync, ...) with a
thin Flask controller layer over service/repository layers. The remote HR API
is the source of truth; this package keeps a replaceable in-memory copy plus a
local offline cache.
"""
