"""
Configuration for the gallery page generator.
"""

import os

# Local preview server (`npm run dev` / `observable preview`)
HTTP_ROOT = os.environ.get("GALLERY_HTTP_ROOT", "http://127.0.0.1:3033")

# MiniSearch index served by the preview server
MINISEARCH_PATH = "/_observablehq/minisearch.json"

# Site sources and the category map
SOURCE_ROOT = "src"
CATEGORIES_PATH = "src/index.json"

# Thumbnails live at src/thumbnail<id>-light.png and src/thumbnail<id>-dark.png
THUMBNAIL_PREFIX = "thumbnail"

# Catch-all category holding every page
MORE_CATEGORY = "more"
MORE_TITLE = "More"

# MiniSearch field ids used when the index doesn't carry fieldIds
TITLE_FIELD = "0"
KEYWORDS_FIELD = "2"

REQUEST_TIMEOUT = 30  # seconds
USER_AGENT = "pangea-gallery/1.0 (+https://github.com/Fil/pangea)"

FRONT_MATTER = """---
theme: wide
index: false
toc: true
comment: Page generated by gallery/generate_index.py
---"""

INTRO = """# Pangea Proxima
## Examples, techniques, algorithms: a collection edited by Fil

_What?_ These pages demonstrate some modern data visualization techniques that you
can use on the Web. They are built with [Observable Framework](https://observablehq.com/framework/),
an open-source static site generator for data apps, dashboards, reports, and more.
We mostly use [Observable Plot](https://observablehq.com/plot/) and [D3](https://d3js.org/),
but also venture outside this ecosystem.

_How?_ To access the code of any page, just click on the view source icon <span>⚉</span> in the top-right corner. If
you’d like to contribute examples, please open a pull-request on the project’s GitHub [repo](https://github.com/fil/pangea). If you want something that you
don’t find here, please open a [feature request](https://github.com/Fil/pangea/issues/new).

_Who?_ I’m Fil Rivière, I work at [Observable](https://observablehq.com/) with the aim of building a strong foundation
for data visualization on the Web. This is a place where I collect, experiment, showcase, and share some
of the goodies. Most of it was authored by other people: Mike Bostock, Volodymyr Agafonkin, Tom McWright, Jason Davies, Allison Horst, Franck Lebeau, Ian
Johnson, Shirley Wu, Nadieh Bremer, Jeffrey Heer, Rene Cutura, Jeff Pettiross, Zan Armstrong, Fabian Iwand, Nicolas Lambert,
Cobus Theunissen, Enrico Spinielli, Harry Stevens, Jareb Wilber, Jean-Daniel Fekete, Dominik Moritz, Kerry Roden, Matteo Abrate, Noah Veltman, Danilo Di Cuia, John Alexis Guerra Gómez, and others… thanks to everyone who publishes open source!

<a class="view-source" href="https://github.com/Fil/pangea/blob/main/src/thumbnail/index.md?plain=1">⚉</a>
"""

STYLE = """<style>
#observablehq-header a.view-source {display: none;}
.gallery h2 {
  margin: 2em 0 0.5em 0;
}
.list {
  display: flex;
  flex-wrap: wrap;
  max-width: 100%;
  gap: 12px;
}
.list a {
  display: block;
  position: relative;
  max-width: 320px;
  width: 260px;
  flex-grow: 1;
  height: 195px;
  border: 1px solid var(--theme-foreground-focus);
  font-family: var(--sans-serif);
}
.list a:hover {
  box-shadow: 0 4px 12px var(--theme-foreground-focus);
  transform: translateY(-1px);
}
.list a q {
  position: absolute;
  top: 0;
  left: 0;
  quotes: none;
  padding: 4px 15px;
  background: var(--theme-foreground-focus);
  color: var(--theme-background-alt);
  max-width: 60%;
  border-radius: 0 0 14px;
  line-height: 1.25em;
  max-height: 2.5em;
  overflow: hidden;
  text-overflow: ellipsis;
}
.list a img {
  width: 100%;
  height: 100%;
  object-fit: cover;
}
</style>"""
