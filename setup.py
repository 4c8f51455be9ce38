from setuptools import setup

requirements = ["click>=8", "flask>=2.3", "gunicorn>=21", "pydantic>=2,<3"]

setup(
    name="timeout-fixture",
    version="0.1.0",
    description="HTTP endpoint that stalls before answering, for testing client timeouts",
    author="IS DevOps team",
    author_email="is-devops-team@canonical.com",
    packages=["timeout_fixture"],
    package_dir={"": "src"},
    install_requires=requirements,
    extras_require={"test": ["pytest", "requests"]},
    entry_points={"console_scripts": ["timeout-fixture=timeout_fixture.__main__:main"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
