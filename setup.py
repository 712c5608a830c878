"""Install the members site."""

from setuptools import setup, find_packages

setup(
    name='members-site',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    py_modules=['wsgi'],
    package_data={'members': ['templates/members/*.html', 'static/*.svg']},
    include_package_data=True,
    install_requires=[
        "flask",
        "wtforms",
        "email-validator",
        "pymongo",
        "bcrypt",
        "pyjwt",
        "python-dateutil",
        "pytz",
        "redis",
        "python-json-logger",
    ],
    extras_require={
        # REDIS_FAKE and MONGODB_FAKE import these at runtime.
        'dev': [
            "fakeredis",
            "mongomock",
        ],
        'test': [
            "pytest",
            "hypothesis",
            "fakeredis",
            "mongomock",
        ]
    },
    zip_safe=False
)
