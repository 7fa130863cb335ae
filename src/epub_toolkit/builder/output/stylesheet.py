"""
Module: builder.output.stylesheet

Purpose:
    The single stylesheet shipped in every package (OEBPS/styles/style.css).
    Pages are full-bleed, centred and aspect-preserving; spread pages use the
    same single-page box so fixed-layout readers can pair them. Kindle,
    print and legacy-reader fallbacks follow the base rules.

Key Functions:
    - stylesheet(): CSS text
"""

from __future__ import annotations

STYLESHEET_PATH = "styles/style.css"

_IMAGE_FIT = """\
  max-width: 100%;
  max-height: 100%;
  width: auto;
  height: auto;
  object-fit: contain;"""

_CENTERED_BOX = """\
  width: 100%;
  height: 100vh;
  display: flex;
  align-items: center;
  justify-content: center;
  margin: 0;
  padding: 0;"""


def stylesheet() -> str:
    """CSS for cover, content, spread and chapter index pages."""
    return f"""/* Fixed-layout image book stylesheet */

* {{
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}}

html, body {{
  margin: 0;
  padding: 0;
  width: 100%;
  height: 100%;
  font-family: serif;
  font-size: 1em;
  line-height: 1.4;
  color: #000;
  background: #fff;
}}

/* Page boxes */
.page-container,
.spread-page .page-container,
.cover-page .page-container,
.back-cover-page .page-container {{
{_CENTERED_BOX}
}}

.cover-page .page-container,
.back-cover-page .page-container {{
  text-align: center;
}}

/* Images */
.page-image,
.spread-page .page-image,
.cover-image,
.back-cover-image {{
{_IMAGE_FIT}
}}

/* Chapter index */
.toc-page {{
  padding: 2em 1em;
  font-family: serif;
  line-height: 1.6;
  color: #000;
}}

.toc-container {{
  max-width: 100%;
  margin: 0 auto;
}}

.toc-nav {{
  width: 100%;
}}

.toc-header {{
  text-align: center;
  margin-bottom: 2em;
  padding-bottom: 1em;
  border-bottom: 2px solid #333;
}}

.toc-title-main {{
  font-size: 1.8em;
  font-weight: bold;
  margin: 0 0 0.5em 0;
  text-align: center;
}}

.toc-subtitle {{
  font-size: 1.2em;
  color: #666;
  margin-bottom: 1em;
  text-align: center;
}}

.toc-decoration {{
  width: 60px;
  height: 2px;
  background: #333;
  margin: 0 auto;
}}

.toc-list {{
  list-style: none;
  padding: 0;
  margin: 0;
}}

.toc-item {{
  margin: 1em 0;
  page-break-inside: avoid;
}}

.toc-link {{
  display: block;
  position: relative;
  padding: 0.8em 1em;
  border: 1px solid #ddd;
  background: #f9f9f9;
  color: #000;
  text-decoration: none;
}}

.toc-title {{
  display: block;
  margin-bottom: 0.2em;
  font-size: 1em;
  font-weight: bold;
}}

.toc-dots {{
  display: none;
}}

.toc-page-number {{
  float: right;
  padding: 0.2em 0.5em;
  border-radius: 3px;
  background: #e0e0e0;
  color: #666;
  font-size: 0.9em;
}}

.toc-footer {{
  margin-top: 2em;
  padding-top: 1em;
  border-top: 1px solid #ddd;
  text-align: center;
}}

.toc-author {{
  margin-bottom: 0.5em;
  color: #333;
  font-weight: bold;
}}

.toc-publisher {{
  color: #666;
  font-size: 0.9em;
  font-style: italic;
}}

/* Kindle KF8 */
@media amzn-kf8 {{
  .page-image, .cover-image, .back-cover-image,
  .spread-page .page-image {{
    width: 100%;
    height: auto;
    max-width: 100%;
  }}

  .page-container, .spread-page .page-container,
  .cover-page .page-container, .back-cover-page .page-container {{
    display: flex;
    width: 100%;
    height: 100vh;
  }}

  .toc-link {{
    overflow: hidden;
  }}

  .toc-page-number {{
    float: none;
    display: inline;
    margin-left: 1em;
  }}
}}

/* Kindle MOBI */
@media amzn-mobi {{
  img {{
    max-width: 100%;
    height: auto;
  }}

  .toc-title-main {{
    font-size: 1.5em;
  }}

  .toc-subtitle {{
    font-size: 1em;
  }}

  .toc-link {{
    padding: 0.5em;
  }}
}}

@media print {{
  .page-image, .cover-image, .back-cover-image,
  .spread-page .page-image {{
    max-width: 100%;
    height: auto;
    page-break-inside: avoid;
  }}

  .toc-item {{
    page-break-inside: avoid;
  }}
}}

/* Older readers */
img {{
  border: none;
  outline: none;
}}

a {{
  color: #000;
}}

a:visited {{
  color: #666;
}}

div, p, h1, h2, h3, ol, li {{
  margin: 0;
  padding: 0;
}}

.toc-list li {{
  list-style-type: none;
}}
"""
