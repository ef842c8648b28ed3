"""QuakeGuide - offline-first earthquake survival assistant backend."""
