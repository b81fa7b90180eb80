"""bofh

Interactive client for the bofhd administration server of Cerebrum.

License: 3-clause BSD. (See the COPYRIGHT file)
"""
