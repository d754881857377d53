from setuptools import setup, find_packages

setup(
    name='pico-deploy',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=[
        'docker>=7.0',
        'pydantic>=2.5',
        'pydantic-settings>=2.1',
        'python-dotenv>=1.0',
        'PyYAML>=6.0',
        'requests>=2.31',
    ],
    extras_require={
        'dev': [
            'pytest>=7.4',
        ],
    },
    entry_points={
        'console_scripts': [
            'pico-deploy=pico_deploy.cli:main',
            'pico-deploy-cpu=pico_deploy.cli:main_cpu',
            'pico-deploy-gpu=pico_deploy.cli:main_gpu',
            'pico-deploy-download-gnark=pico_deploy.cli:main_download_gnark',
        ],
    },
    python_requires='>=3.11',
    description='Bootstrap orchestrator for the Pico proving service and its gnark sidecar.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author='Pico Team',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
    ],
)
