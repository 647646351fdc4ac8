"""Domain packages: each one has its router, service, repository and schemas"""
