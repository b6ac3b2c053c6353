# ============================================================
# Water Quality Portal site pipeline – shared configuration
# ============================================================

import os
from pathlib import Path

# -----------------------------
# Sites and output paths
# -----------------------------
DEFAULT_SITES = ["USGS-01491000", "USGS-01646500"]
SITES = [s.strip() for s in os.environ.get("WQ_SITES", ",".join(DEFAULT_SITES)).split(",") if s.strip()]

OUTPUT_DIR = Path(os.environ.get("WQ_OUTPUT_DIR", "data_outputs"))
LONG_CSV = "wq_long.csv"
WIDE_CSV = "wq_wide.csv"
PLOT_DIR = "plots"

# -----------------------------
# WQP endpoints
# -----------------------------
RESULT_URL = "https://www.waterqualitydata.us/data/Result/search"
STATION_URL = "https://www.waterqualitydata.us/data/Station/search"
TIMEOUT = int(os.environ.get("WQ_TIMEOUT", "300"))

# -----------------------------
# Column renames (WQP -> pipeline fields)
# -----------------------------
RESULT_COLUMNS = {
    "OrganizationIdentifier": "org_id",
    "OrganizationFormalName": "org_name",
    "ActivityConductingOrganizationText": "conducting_org",
    "MonitoringLocationIdentifier": "site_id",
    "ActivityStartDate": "date",
    "ActivityDepthHeightMeasure/MeasureValue": "depth",
    "CharacteristicName": "category",
    "ResultSampleFractionText": "fraction",
    "ResultMeasureValue": "raw_value",
    "MeasureQualifierCode": "qualifier",
    "ResultDetectionConditionText": "detection_condition",
    "DetectionQuantitationLimitMeasure/MeasureValue": "detection_limit",
}

STATION_COLUMNS = {
    "OrganizationIdentifier": "org_id",
    "MonitoringLocationIdentifier": "site_id",
    "MonitoringLocationName": "site_name",
    "MonitoringLocationDescriptionText": "site_description",
    "HUCEightDigitCode": "huc",
    "LatitudeMeasure": "latitude",
    "LongitudeMeasure": "longitude",
}

# Identifying columns of one sample event, and of one aggregated measurement
EVENT_KEYS = ["org_id", "org_name", "conducting_org", "site_id", "depth", "date"]
OBSERVATION_KEYS = EVENT_KEYS + ["variable"]
JOIN_KEYS = ["org_id", "site_id"]

# -----------------------------
# Recognized characteristics and their normalized variable
# -----------------------------
# None as fraction means "any fraction"
VARIABLE_MAP = {
    ("pH", None): "pH",
    ("Total suspended solids", None): "TSS_mgL",
    ("Suspended Sediment Concentration (SSC)", None): "TSS_mgL",
    ("Dissolved oxygen (DO)", None): "DO_mgL",
    ("Dissolved oxygen saturation", None): "DO_mgL",
    ("Kjeldahl nitrogen", None): "TKN_mgL",
    ("Total Kjeldahl nitrogen (Organic N & NH3)", None): "TKN_mgL",
    ("Ammonia", "Dissolved"): "NH3_mgL",
    ("Ammonia", "Total"): None,
    ("Nitrate + Nitrite", None): "NO23_mgL",
    ("Inorganic nitrogen (nitrate and nitrite)", None): "NO23_mgL",
    ("Orthophosphate", None): "Orthophosphate_mgL",
    ("Phosphate-phosphorus", "Dissolved"): "TDP_mgL",
    ("Phosphate-phosphorus", "Total"): "TP_mgL",
    ("Chlorophyll a (probe relative fluorescence)", None): "Chl_probe_RFU",
    ("Chlorophyll a, uncorrected for pheophytin", None): "Chla_uncorrected_ugL",
}

CATEGORIES = list(dict.fromkeys(cat for cat, _ in VARIABLE_MAP))
VARIABLES = list(dict.fromkeys(v for v in VARIABLE_MAP.values() if v is not None))

# -----------------------------
# Surface-water depth cutoff (same unit as the WQP depth field)
# -----------------------------
MAX_DEPTH = 1.0

# -----------------------------
# Non-detect flags for optional half-detection-limit substitution
# -----------------------------
BDL_CONDITIONS = ["Not Detected", "Below Reporting Limit", "Detected Not Quantified", "Present Below Quantification Limit"]
BDL_QUALIFIERS = ["<", "ND", "BDL", "U", "BQL"]
