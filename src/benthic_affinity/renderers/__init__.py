"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: summary table rows / event baseline dicts (as stored by the
    summarize flow)
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py which orchestrates the report pipeline.

Public API:
  - species_profile: build_species_profile_html, category_frequencies
  - species_index: build_species_index_html, dominant_category
  - event_baseline: build_event_baseline_html
  - category_palette: build_category_palette
  - format_utils: fmt_number, fmt_pct, bar_width, species_page_name

Adding a renderer (report section)
----------------------------------
1. Create ``renderers/{name}.py`` with a build function::

       from benthic_affinity.renderers import render_template

       def build_mysection_html(rows: list[dict[str, Any]]) -> str:
           items = [...]
           return render_template("mysection.html.j2", items=items)

2. Create a Jinja2 template in ``templates/{name}.html.j2``.
   Templates produce HTML fragments (no <html>/<body> tags).
   CSS goes in ``templates/base.html.j2`` within the <style> block.

3. Wire into ``flows/build.py`` and pass the fragment as page content.

4. Add tests: call your build function with sample rows and assert
   the returned HTML contains expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
