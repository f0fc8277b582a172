"""Password Generator Meta information.
   Password Generator keeps service credentials in a local vault
   encrypted under a single master password.
"""
__title__ = 'password_generator'
__description__ = (
   'Password Generator keeps service credentials in a local vault '
   'encrypted under a single master password.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2024 Justin Kirsch'
__author__ = 'Justin Kirsch'
__author_email__ = 'justin.kirsch@example.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/justinkirsch/password-generator'
