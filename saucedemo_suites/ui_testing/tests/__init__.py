"""SauceDemo login scenarios and browser-level checks of the interaction layer."""
