import setuptools


setuptools.setup(
    name="fourleads",
    version="0.1.0",
    author="4leads GmbH",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    description="Python client for the 4leads REST API.",
    long_description_content_type="text/markdown",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.7",
    install_requires=[
        "requests"
    ],
    extras_require={
        "test": ["flask", "pytest"],
    }
)
