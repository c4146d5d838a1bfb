"""Web scraping adapters: portal endpoints and HTML parsers."""
