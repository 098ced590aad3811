"""
In-page JavaScript evaluated by the browser session.

Kept as plain strings so the session code stays readable and each
script can be reviewed on its own.
"""

from __future__ import annotations

# Elements of the document, including open shadow roots and
# same-origin iframes.  An <svg> counts as a single node.
COUNT_DOM_ELEMENTS = """() => {
    const countIn = (root) => {
        let total = 0;
        for (const el of root.children) {
            total += 1;
            if (el.localName === 'svg') continue;
            if (el.shadowRoot) total += countIn(el.shadowRoot);
            if (el.localName === 'iframe' || el.localName === 'frame') {
                let doc = null;
                try {
                    doc = el.contentDocument;
                } catch (e) {
                    doc = null;
                }
                if (doc && doc.documentElement) total += countIn(doc);
            }
            total += countIn(el);
        }
        return total;
    };
    return countIn(document);
}"""

HAS_FIRST_PAINT = """() => performance
    .getEntriesByType('paint')
    .some((e) => e.name === 'first-paint' || e.name === 'first-contentful-paint')"""

DOCUMENT_HEIGHT = """() => Math.max(
    document.body ? document.body.scrollHeight : 0,
    document.documentElement ? document.documentElement.scrollHeight : 0,
)"""

NAVIGATION_TIMING = """() => {
    const nav = performance.getEntriesByType('navigation')[0];
    if (!nav) return null;
    const rel = (t) => (t > 0 ? t - nav.startTime : null);
    return {
        ttfb: Math.max(nav.responseStart - nav.startTime, 0),
        domContentLoaded: rel(nav.domContentLoadedEventEnd),
        loadEventEnd: rel(nav.loadEventEnd),
    };
}"""

# Buffered observers replay entries recorded before they were created;
# their callbacks run asynchronously, hence the short settle.
WEB_VITALS = """() => new Promise((resolve) => {
    const fcp = performance.getEntriesByName('first-contentful-paint')[0];
    let lcp = null;
    let cls = 0;
    try {
        new PerformanceObserver((list) => {
            for (const e of list.getEntries()) lcp = e.renderTime || e.loadTime || e.startTime;
        }).observe({ type: 'largest-contentful-paint', buffered: true });
        new PerformanceObserver((list) => {
            for (const e of list.getEntries()) if (!e.hadRecentInput) cls += e.value;
        }).observe({ type: 'layout-shift', buffered: true });
    } catch (e) {
        // Entry types unsupported by this browser.
    }
    setTimeout(() => resolve({
        firstContentfulPaint: fcp ? fcp.startTime : null,
        largestContentfulPaint: lcp,
        cumulativeLayoutShift: cls,
    }), 100);
})"""
