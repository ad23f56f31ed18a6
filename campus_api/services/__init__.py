# Services package.
#
# crud: the generic list/get/create/update/delete engine that every
#        resource declared in ``campus_api.resources`` runs through.
#
# Service methods receive the request's AsyncSession (via the router) so
# that the ``get_db`` dependency controls the transaction boundary.
