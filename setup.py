from setuptools import find_namespace_packages, setup

VERSION = "1.0.0"

requirements = open("requirements.txt").readlines()

if __name__ == "__main__":
    setup(
        name='cli-frameworks-setup',
        version=VERSION,
        packages=find_namespace_packages(include=['setupkit', 'setupkit.*']),
        package_data={'setupkit.templates': ['tree/*']},
        description='Interactive setup of Vite + React or Vue TypeScript projects',
        long_description=open('README.md').read(),
        long_description_content_type='text/markdown',
        classifiers=[
            'Development Status :: 4 - Beta',
            'Environment :: Console',
            'Intended Audience :: Developers',
            'Programming Language :: Python :: 3',
        ],
        install_requires=requirements,
        extras_require={
            'test': ['pytest', 'pytest-asyncio'],
        },
        entry_points={
            'console_scripts': ['cli-frameworks-setup=setupkit.cli.main:run_setup'],
        },
        python_requires='>=3.9',
    )
