from setuptools import setup

with open("./README.md") as f:
    long_description = f.read()

setup(
    name="training-manager",
    description="Resolves which group is on duty for a training role",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=['training_manager'],
    py_modules=['assign_json'],
    version='0.1',
    python_requires='>=3.11',
    install_requires=['schema', 'python-dateutil', 'click'],
    extras_require={
        'api': ['flask'],
        'test': ['pytest', 'flask'],
    },
    entry_points={
        'console_scripts': ['training-manager=assign_json:main'],
    },
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ]
)
