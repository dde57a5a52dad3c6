"""State layer.

This package owns everything the services table keeps in memory: the
canonical list of records, the selection over it, the filtered page view,
the edit dialog and bulk deletion. The list store is the single source of
truth; everything else is derived from it or writes through the client and
then refreshes it.
"""
