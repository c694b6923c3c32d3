UNMERGED_COMMITS_QUERY = """
query UnmergedCommits($owner: String!, $repo: String!, $base: String!, $head: String!, $commits: Int!) {
  repository(owner: $owner, name: $repo) {
    ref(qualifiedName: $base) {
      compare(headRef: $head) {
        commits(first: $commits) {
          nodes {
            oid
            associatedPullRequests(first: 10) {
              nodes {
                number
                title
                body
                author {
                  login
                }
                labels(first: 20) {
                  nodes {
                    name
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""
