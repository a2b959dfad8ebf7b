"""COVID-19 country dashboard (REST Countries + disease.sh)."""

__version__ = "0.1.0"
