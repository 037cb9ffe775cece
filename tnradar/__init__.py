# ABOUTME: Data-acquisition layer for the TN Radar weather and disaster dashboard.
# ABOUTME: Fetches, validates, and normalizes Open-Meteo, Nominatim, and USGS data.
