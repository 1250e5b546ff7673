#!/usr/bin/env python3

from setuptools import find_packages, setup


def get_version():
    with open("debian/changelog", "r", encoding="utf-8") as f:
        return f.readline().split()[1][1:-1]


setup(
    name="mqtt2influx",
    version=get_version(),
    description="Write MQTT device telemetry (xiaomi, tasmota, zigbee2mqtt, ...) to InfluxDB",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "paho-mqtt>=2.0",
        "influxdb-client>=1.36",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mqtt2influx=mqtt2influx.client.main:run",
        ],
    },
)
