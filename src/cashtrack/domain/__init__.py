"""Domain layer for cashtrack application.

Services live in their own modules (``cashtrack.domain.account`` and so on)
and are imported from there, which keeps ``cashtrack.database`` free to
import the entities without pulling the services in.
"""
