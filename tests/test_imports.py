import importlib

MODULES = [
    'sitecrawl.config',
    'sitecrawl.container',
    'sitecrawl.domain',
    'sitecrawl.services.url_normalizer',
    'sitecrawl.services.crawl_policy',
    'sitecrawl.services.retry_controller',
    'sitecrawl.services.link_extractor',
    'sitecrawl.services.site_crawler',
    'sitecrawl.services.http_page_driver',
    'sitecrawl.services.headless_browser_driver',
    'sitecrawl.services.page_list_cache',
]

def test_imports():
    for m in MODULES:
        importlib.import_module(m)
