from setuptools import find_namespace_packages, setup

# Install in development mode:
#   pip install -e .[test]

setup(
    name='CarSearchPro',
    version='1.0',
    description="CarSearch Pro - car search tracking with branded PDF reports",
    author='CarSearch Pro',
    author_email='info@carsearchpro.nl',
    url='https://www.carsearchpro.nl',
    packages=find_namespace_packages(include=['carsearch', 'carsearch.*']),
    python_requires='>=3.10',
    install_requires=[
        'fastapi',
        'uvicorn',
        'pydantic>=2',
        'reportlab',
        'Pillow',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Framework :: FastAPI',
    ],
)
