"""
Live page snapshot - materializes a Playwright page into a SoupDocument.

Form control state (typed text, checked boxes, chosen options) lives in
DOM properties, not attributes, so a plain ``page.content()`` would miss
it. The snapshot script clones the survey region and copies that state
onto the clone before serializing it.
"""

import logging

from .soup import SoupDocument

logger = logging.getLogger(__name__)


SNAPSHOT_REGION_JS = """
(regionId) => {
    const region = document.getElementById(regionId);
    if (!region) return null;
    const clone = region.cloneNode(true);
    const live = region.querySelectorAll('input, textarea, select');
    const copies = clone.querySelectorAll('input, textarea, select');
    live.forEach((el, i) => {
        const copy = copies[i];
        if (!copy) return;
        const tag = el.tagName.toLowerCase();
        if (tag === 'textarea') {
            copy.textContent = el.value;
        } else if (tag === 'select') {
            Array.from(copy.options).forEach((opt, j) => {
                if (el.options[j] && el.options[j].selected) opt.setAttribute('selected', 'selected');
                else opt.removeAttribute('selected');
            });
        } else {
            copy.setAttribute('value', el.value);
            if (el.checked) copy.setAttribute('checked', 'checked');
            else copy.removeAttribute('checked');
        }
    });
    return clone.outerHTML;
}
"""


async def snapshot_live_page(page, region_id: str) -> SoupDocument:
    """Snapshot the survey region of ``page``; empty document when the region is absent."""
    html = await page.evaluate(SNAPSHOT_REGION_JS, region_id)
    if not html:
        logger.debug(f"Region #{region_id} not present in live page")
        return SoupDocument.empty()
    return SoupDocument.from_html(html)
