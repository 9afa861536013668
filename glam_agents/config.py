"""
Configuration settings for the glam_agents package.
"""

import os

from dotenv import load_dotenv

load_dotenv()

#==============================================================================
# MODEL CONFIGURATION
#==============================================================================

# Alias from glam_agents.ai.clients.MODELS used to interpret styling prompts
MAKEUP_MODEL = os.getenv('MAKEUP_MODEL', 'gemini-2.5-flash')

# Model calls slower than this fall back to the keyword classifier
MAKEUP_MODEL_TIMEOUT = float(os.getenv('MAKEUP_MODEL_TIMEOUT', '8.0'))

# Low temperature keeps suggestions consistent between identical prompts
MAKEUP_MODEL_TEMPERATURE = float(os.getenv('MAKEUP_MODEL_TEMPERATURE', '0.2'))
MAKEUP_MODEL_MAX_TOKENS = int(os.getenv('MAKEUP_MODEL_MAX_TOKENS', '1024'))

#==============================================================================
# LOOK CACHE
#==============================================================================

# 0 disables the corresponding limit
LOOK_CACHE_MAX_ENTRIES = int(os.getenv('LOOK_CACHE_MAX_ENTRIES', '256'))
LOOK_CACHE_TTL_SECONDS = float(os.getenv('LOOK_CACHE_TTL', '3600'))

#==============================================================================
# RENDERING / RECONCILIATION
#==============================================================================

RECONCILE_INTERVAL_SECONDS = float(os.getenv('RECONCILE_INTERVAL', '2.0'))
RECONCILE_MAX_ATTEMPTS = int(os.getenv('RECONCILE_MAX_ATTEMPTS', '10'))

#==============================================================================
# PRODUCT RECOMMENDATIONS
#==============================================================================

RECOMMEND_TOP_K = int(os.getenv('RECOMMEND_TOP_K', '2'))

# JSON catalog supplied by the storefront; bundled demo catalog when unset
PRODUCT_CATALOG_PATH = os.getenv('PRODUCT_CATALOG_PATH')
