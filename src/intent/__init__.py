"""Intent classification.

The intent layer converts free-form chat text into a strict `Intent` object, which is then used to
pick the anime catalog lookup for the turn.
"""
