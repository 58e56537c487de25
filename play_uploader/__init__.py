"""Upload an Android App Bundle to Google Play and release it on the internal track."""

__version__ = '0.3.0'
