import strawberry
from cardledger.resolvers.mutation import Mutation
from cardledger.resolvers.query import Query
from cardledger.resolvers.subscription import Subscription

schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)
