import matplotlib

# Headless rendering for the whole suite
matplotlib.use("Agg")
