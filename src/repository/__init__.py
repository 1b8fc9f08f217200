"""Project loaders for composer, npm and pypi projects."""
