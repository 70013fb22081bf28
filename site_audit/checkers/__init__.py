"""
Markup checks.

Contains:
- ViewportMetaCheck - viewport meta
- MobileWebAppMetaCheck - apple-mobile-web-app meta
- MobileControlsCheck - mobile controls marker
- TouchActionCheck - touch-action CSS
- InlineScriptCheck - touch handlers in the first inline script
"""
