"""
Factorio Friday Facts.

- **fff_client.py**: Downloads a blog post from factorio.com and reads its
  OpenGraph metadata with BeautifulSoup.
"""
