from hypothesis import HealthCheck, settings

# The first run builds Hypothesis's unicode charmap cache (for st.characters()),
# which can take seconds and trip the too_slow health check on a cold cache.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")
