"""Daily construction-site reports written to Google Sheets over user OAuth."""

__version__ = "0.1.0"
