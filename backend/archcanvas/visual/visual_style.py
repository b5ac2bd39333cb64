COMPONENT_STYLE = {
    "frontend": {"background": "#e3f2fd", "borderColor": "#2196f3"},
    "backend": {"background": "#f3e5f5", "borderColor": "#9c27b0"},
    "service": {"background": "#e8f5e8", "borderColor": "#4caf50"},
    "database": {"background": "#fff3e0", "borderColor": "#ff9800"},
    "cache": {"background": "#fce4ec", "borderColor": "#e91e63"},
    "gateway": {"background": "#f1f8e9", "borderColor": "#8bc34a"},
    "cdn": {"background": "#e0f2f1", "borderColor": "#009688"},
    "queue": {"background": "#f3e5f5", "borderColor": "#673ab7"},
}

DEFAULT_STYLE = {"background": "#f5f5f5", "borderColor": "#666"}

BOX_STYLE = {
    "borderRadius": "8px",
    "padding": "16px",
    "minWidth": "140px",
}


def style_for(component_type: str) -> dict:
    return {
        **DEFAULT_STYLE,
        **COMPONENT_STYLE.get(component_type, {}),
        **BOX_STYLE,
    }
