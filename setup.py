from setuptools import setup, find_packages

setup(
    name="cageviz",
    version="0.1.0",
    description="Live population statistics and charts for a mouse-cage genetics game",
    author="adamfilli",
    packages=find_packages(include=["cageviz", "cageviz.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
