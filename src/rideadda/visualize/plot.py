# rideadda/visualize/plot.py
"""
Plotting routines for RideAdda
"""

import matplotlib.pyplot as plt

from rideadda.analyze.track import iter_segments


def plot_speed(points, title="Track coloured by speed", show=True):
    """Scatter the track, each fix coloured by the speed (km/h) of the segment it starts."""
    lats = []
    lons = []
    speeds = []
    for p0, _, dt_s, d_km in iter_segments(points):
        lats.append(p0.latitude)
        lons.append(p0.longitude)
        speeds.append(d_km * 3600.0 / dt_s)

    fig = plt.figure(figsize=(8,6))
    sc = plt.scatter(lons, lats, c=speeds, s=5, cmap="viridis")
    plt.colorbar(sc, label="Speed (km/h)")
    plt.xlabel("Longitude")
    plt.ylabel("Latitude")
    plt.title(title)
    if show:
        plt.show()
    return fig
