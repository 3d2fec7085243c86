"""Weekly release digest.

Renders a Markdown "RELEASES" section from the release records a
release-listing client hands over, for posting to a chat channel or a
weekly report.
"""

__version__ = "0.1.0"
