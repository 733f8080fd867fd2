"""Pure helpers for the external data fetcher: authentication, templating and response extraction."""
