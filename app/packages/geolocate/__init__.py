"""Geolocate package - IP and coordinate geolocation.

Routes live in ``packages.geolocate.routes`` and are mounted by
``api.router``; they are not imported here so the service layer can be
imported without FastAPI routing side effects.
"""
