from setuptools import setup, find_packages

setup(
    name="gust-watchdog",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "gust_watchdog": ["templates/*.j2"],
    },
    python_requires=">=3.9",
    install_requires=[
        "pandas",
        "requests",
        "python-dotenv",
        "jinja2"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'gust-watchdog=gust_watchdog.main:main',
        ],
    },
)
