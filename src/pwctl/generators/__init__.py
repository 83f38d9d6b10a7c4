"""Password generators — opaque collaborators invoked by the dispatcher.

Each generator is a plain function of length and flags returning a string.
All randomness comes from :mod:`secrets`.
"""
