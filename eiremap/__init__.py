"""eiremap — hover labels and choropleth maps for Irish administrative regions."""

__version__ = "1.0.0"
