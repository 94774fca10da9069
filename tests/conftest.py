import matplotlib

# Headless backend for every test touching the Matplotlib sink
matplotlib.use("Agg")
