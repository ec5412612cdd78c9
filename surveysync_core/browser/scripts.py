"""JavaScript installed into the survey page by the live binding."""

INSTALL_OBSERVER_JS = """
(opts) => {
    if (window.__surveysync && window.__surveysync.installed) return !!window.__surveysync.region;
    const state = window.__surveysync = {
        installed: true, observer: null, waiter: null, region: null, onInput: null
    };

    const elementOf = (node) => {
        if (!node) return null;
        return node.nodeType === Node.ELEMENT_NODE ? node : node.parentElement;
    };

    const questionIndex = (node) => {
        const el = elementOf(node);
        const question = el && el.closest(opts.questionSelector);
        if (!question || !state.region) return null;
        const index = Array.from(state.region.querySelectorAll(opts.questionSelector)).indexOf(question);
        return index >= 0 ? index + 1 : null;
    };

    const serialize = (m) => {
        const target = m.target;
        const el = target.nodeType === Node.ELEMENT_NODE ? target : null;
        const parent = target.parentNode;
        const closest = elementOf(target);
        let value = null;
        if (m.type === 'characterData') value = target.data;
        else if (m.attributeName && el) value = el.getAttribute(m.attributeName);
        return {
            kind: m.type,
            targetTag: el ? el.tagName.toLowerCase() : '',
            targetClasses: el ? Array.from(el.classList) : [],
            attributeName: m.attributeName,
            parentTag: parent && parent.tagName ? parent.tagName.toLowerCase() : null,
            inScaleList: !!(closest && closest.closest(opts.scaleListSelector)),
            questionIndex: questionIndex(target),
            value: value,
        };
    };

    const attach = (region) => {
        state.region = region;
        state.observer = new MutationObserver((mutations) => {
            window[opts.batchBinding](mutations.map(serialize));
        });
        state.observer.observe(region, {
            childList: true,
            subtree: true,
            attributes: true,
            attributeFilter: ['class', opts.selectionAttr],
            characterData: true,
        });
        state.onInput = (event) => {
            const t = event.target;
            window[opts.inputBinding]({
                targetTag: t.tagName ? t.tagName.toLowerCase() : '',
                inputType: t.type || '',
                value: t.value || '',
                questionIndex: questionIndex(t),
            });
        };
        region.addEventListener('input', state.onInput);
        window[opts.attachedBinding]();
    };

    const region = document.getElementById(opts.regionId);
    if (region) {
        attach(region);
        return true;
    }
    state.waiter = new MutationObserver(() => {
        const found = document.getElementById(opts.regionId);
        if (found) {
            state.waiter.disconnect();
            state.waiter = null;
            attach(found);
        }
    });
    state.waiter.observe(document.documentElement, {childList: true, subtree: true});
    return false;
}
"""

UNINSTALL_OBSERVER_JS = """
() => {
    const state = window.__surveysync;
    if (!state) return false;
    if (state.observer) state.observer.disconnect();
    if (state.waiter) state.waiter.disconnect();
    if (state.region && state.onInput) state.region.removeEventListener('input', state.onInput);
    window.__surveysync = null;
    return true;
}
"""
