from setuptools import setup, find_packages
setup(
    name="landiq",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.100,<0.137",
        "pydantic>=2",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "httpx",
        ],
    },
    entry_points={
        'console_scripts': [
            'landiq=landiq.__main__:main'
        ]
    }
)
