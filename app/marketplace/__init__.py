"""
Marketplace application.

Products and the social activity around them (likes, comments, follows,
product and profile views). These rows are the sources for engagement
notifications and the daily/hourly notification sweeps.
"""
