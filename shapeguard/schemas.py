"""Guards for the bodies accepted by the settings and admin endpoints."""

OPTIONAL = {"?": "?"}

CUSTOM_UI_GUARD = {
    "msgBackground": "string",
    "botBackground": "string",
    "chatTextColor": "string",
    "chatEmphasisColor": "string",
    "chatQuoteColor": "string",
}

UI_SETTINGS_GUARD = {
    "theme": "string",
    "themeBg": "string?",
    "customBg": "string?",
    "mode": ["light", "dark"],
    "background": "string?",
    "font": ["default", "lato"],
    "imageWrap": "boolean?",
    "trimSentences": "boolean",
    "mobileSendOnEnter": "boolean?",
    "contextWindowLine": "boolean?",
    "chatMode": ["standard", "split", "background", "background-cover", "background-contain", None],
    "chatModeHeight": "number?",
    "chatAlternating": "boolean?",
    "avatarSize": ["xs", "sm", "md", "lg", "xl", "2xl", "3xl"],
    "avatarCorners": ["sm", "md", "lg", "circle", "none"],
    "chatWidth": ["narrow", "full", "xl", "2xl", "3xl", "fill", None],
    "msgOpacity": "number",
    "msgOptsInline": "any?",
    "light": {**CUSTOM_UI_GUARD, **OPTIONAL},
    "dark": {**CUSTOM_UI_GUARD, **OPTIONAL},
}

IMAGE_SETTINGS_GUARD = {
    "type": ["novel", "horde", "sd", "agnai"],
    "summaryPrompt": "string?",
    "summariseChat": "boolean?",
    "prefix": "string?",
    "suffix": "string?",
    "negative": "string?",
    "template": "string?",
    "clipSkip": "number?",
    "width": "number",
    "height": "number",
    "steps": "number",
    "cfg": "number",
    "seed": "number?",
    "novel": {"model": "string", "sampler": "string"},
    "horde": {"model": "string", "sampler": "string"},
    "sd": {"sampler": "string", "url": "string"},
    "agnai": {"model": "string", "sampler": "string", "draftMode": "boolean"},
}

USER_CONFIG_GUARD = {
    "defaultAdapter": "string",
    "defaultPreset": "string?",
    "chargenPreset": "string?",
    "scaleUrl": "string?",
    "scaleApiKey": "string?",
    "claudeApiKey": "string?",
    "elevenLabsApiKey": "string?",
    "hordeName": "string?",
    "hordeUseTrusted": "boolean?",
    "hordeWorkers": ["string?"],
    "useRecommendedImages": ["all", "except-size", "except-affix", "except-negative", "none", None],
    "speechtotext": {"enabled": "boolean", "autoSubmit": "boolean", "autoRecord": "boolean", **OPTIONAL},
    "images": {**IMAGE_SETTINGS_GUARD, **OPTIONAL},
    "adapterConfig": "any?",
}

ADMIN_CONFIG_GUARD = {
    "supportEmail": "string",
    "maintenance": "boolean",
    "maintenanceMessage": "string",
    "stripeCustomerPortal": "string?",
    "lockSeconds": "number",
    "googleClientId": "string?",
    "googleEnabled": "boolean",
    "policiesEnabled": "boolean",
    "slots": "string",
}
