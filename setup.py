"""Install the PACMEG package."""

from setuptools import setup

setup(
    name="pacmeg",
    version="1.0.0dev",
    description="Phase-amplitude coupling comodulograms with surrogate statistics.",
    package_dir={"": "src"},
    packages=[
        "pacmeg",
        "pacmeg.filt",
        "pacmeg.pac",
        "pacmeg.utils",
    ],
    python_requires=">=3.10",
    install_requires=[
        "joblib>=1.2",
        "mne>=1.7",
        "numpy>=1.22",
        "scipy>=1.9",
        "numba>=0.56",
    ],
    extras_require={"test": ["pytest"]},
)
