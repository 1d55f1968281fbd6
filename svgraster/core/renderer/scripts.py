"""Scripts evaluated inside the loaded SVG document."""

from .base import PageScript

# Returns the raw sizing attributes of the root element and its viewBox.
READ_GEOMETRY = PageScript(
    name="read_geometry",
    source="""() => {
        const el = document.documentElement;
        const box = el.viewBox ? el.viewBox.animVal : null;
        return {
            width: el.getAttribute("width"),
            height: el.getAttribute("height"),
            viewBoxWidth: box ? box.width : null,
            viewBoxHeight: box ? box.height : null,
        };
    }""",
)

# Sets (value given) or removes (null) the root element's width/height.
APPLY_DIMENSIONS = PageScript(
    name="apply_dimensions",
    source="""(attributes) => {
        const el = document.documentElement;
        for (const name of ["width", "height"]) {
            const value = attributes[name];
            if (value) {
                el.setAttribute(name, value);
            } else {
                el.removeAttribute(name);
            }
        }
        return {
            width: el.getAttribute("width"),
            height: el.getAttribute("height"),
        };
    }""",
)
