# ABOUTME: Country flashcard generator built on Wikipedia article wikitext
# ABOUTME: Fetches, caches and resolves articles, extracts map/flag/capital and renders Markdown cards

__version__ = "0.1.0"
