# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="bzlbench",
    version="0.1.0",
    description="Generador de workspaces Bazel sintéticos para medir la escalabilidad del build",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["bzlbench*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'bzlbench=bzlbench.main:main',  # Permite ejecutar el generador vía CLI
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
