"""
Configuration for the documentation search index aggregator.
"""

# Site generators we know how to pull a MiniSearch index from
FRAMEWORK = "framework"  # Observable Framework: _observablehq/minisearch.<hash>.json
VITEPRESS = "vitepress"  # VitePress local search: assets/chunks/@localSearchIndexroot.<hash>.js

# Sites to aggregate, in output order.
# "source" is the URL recorded next to the index (defaults to "ref").
SOURCES = [
    {
        "key": "d3",
        "kind": FRAMEWORK,
        "ref": "https://d3.observablehq.cloud/examples/",
    },
    {
        "key": "d3docs",
        "kind": VITEPRESS,
        "ref": "https://d3js.org/",
        "source": "https://d3js.org",
    },
    {
        "key": "documentation",
        "kind": VITEPRESS,
        "ref": "https://observablehq.com/documentation/",
        "source": "https://observablehq.com",
    },
    {
        "key": "framework",
        "kind": FRAMEWORK,
        "ref": "https://observablehq.com/framework/",
    },
    {
        "key": "pangea",
        "kind": FRAMEWORK,
        "ref": "https://observablehq.observablehq.cloud/pangea/",
    },
    {
        "key": "plot",
        "kind": VITEPRESS,
        "ref": "https://observablehq.com/plot/",
        "source": "https://observablehq.com",
    },
]

# HTTP settings
REQUEST_TIMEOUT = 30  # seconds
USER_AGENT = "pangea-search-index/1.0 (+https://github.com/Fil/pangea)"
